from hava_pipeline.main import main

main()
